"""Nexus Obra back office API: multi-tenant clients, users and obras."""
