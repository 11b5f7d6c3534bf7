"""Database Metadata — declarative Base shared by the relational store models."""
