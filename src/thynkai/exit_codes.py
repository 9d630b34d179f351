"""Exit codes for thynkai CLI commands.

Usage errors, invalid registry documents and I/O failures all share
GENERAL_ERROR so scripts only need to check for non-zero.
"""

# Success
SUCCESS = 0

# Errors
GENERAL_ERROR = 1
