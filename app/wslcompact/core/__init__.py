"""Core configuration, elevation check and run orchestration."""
