"""stcgen: generate stc.yaml structure manifests for a source tree."""

__version__ = "0.1.0"
