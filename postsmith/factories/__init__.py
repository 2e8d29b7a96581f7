"""Factories wiring clients and services from settings."""
