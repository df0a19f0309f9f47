"""Catalog microservice: garments, size allocation ledger and color variants."""
