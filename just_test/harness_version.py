# just_test/harness_version.py
# Harness version and protocol constants. Single authoritative definition.
# Referenced by tap_writer.py, error_handler.py, harness.py and run_tests.py.

HARNESS_VERSION: str = "1.0.0"

# Exit codes.
#   0 -- every assertion passed and no runtime fault was intercepted.
#   1 -- at least one assertion failed, or a runtime fault was intercepted.
#   2 -- command-line usage error (argparse).
EXIT_OK: int = 0
EXIT_FAILURE: int = 1
EXIT_USAGE: int = 2

# Result number used by the synthetic record written for intercepted faults.
# Real assertion numbers start at 1, so 0 never collides with them.
FATAL_RESULT_NUMBER: int = 0
