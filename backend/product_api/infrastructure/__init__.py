"""Infrastructure Layer: database, store implementation, logging, rate limiting."""
