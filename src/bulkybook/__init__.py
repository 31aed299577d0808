"""BulkyBook online bookstore."""
