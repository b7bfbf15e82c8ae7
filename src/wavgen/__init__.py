"""wavgen — deterministic test-signal synthesis and WAV tooling."""

__version__ = "0.1.0"
