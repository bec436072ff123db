"""Configuration, logging, domain errors and the in-memory record store."""
