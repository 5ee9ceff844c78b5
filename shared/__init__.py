"""Shared configuration, logging and database models for the claims service."""
