"""Core building blocks: registry, styles, formatter, walker and interceptor."""
