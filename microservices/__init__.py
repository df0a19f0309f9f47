"""Storefront microservices."""
