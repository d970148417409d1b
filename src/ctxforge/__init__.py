"""ctxforge - Context Engineering Framework for LLM-assisted development."""

__version__ = "2.0.0"
