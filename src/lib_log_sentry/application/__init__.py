"""Application layer: ports and use cases of the Sentry hook."""
