"""Settings package for BulkyBook."""
