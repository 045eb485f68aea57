"""Shared utilities: error taxonomy, log masking, input validation."""
