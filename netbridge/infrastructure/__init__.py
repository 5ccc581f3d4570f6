"""Infrastructure Layer — logging setup and the process-wide registry provider."""
