"""Core functionality: tokenization, filtering, scoring, ranking and formatting."""

# Note: Imports kept out of __init__ so that submodule names such as
# ``search`` are not shadowed by the functions they define.
# Import directly from submodules instead:
#   from historylens.core.search import find_relevant_history
#   from historylens.core.formatting import format_history_for_llm

__all__ = []
