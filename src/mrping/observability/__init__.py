"""Request tracing, Prometheus metrics, and Sentry error reporting."""
