"""task-cli - Track short tasks from the command line.

Tasks are kept in a single JSON file (``~/.tasks.json`` by default) which is
loaded in full, mutated, and written back on every invocation.

Installation:
    pip install -e .
"""

__version__ = "0.1.0"
