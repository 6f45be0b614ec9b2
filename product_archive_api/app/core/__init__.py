"""Settings, logging, domain exceptions and request instrumentation."""
