"""Core module: identity, companies, request wiring and startup seeding."""
