import os

# Skip re-running rules when nothing validated changed since the last pass
VALIDATION_RESULT_CACHE = os.getenv("VALIDATION_RESULT_CACHE", "1") not in ("0", "false", "False")

# Run field chains concurrently on the event loop (0 = one field after another)
VALIDATION_CONCURRENT_FIELDS = os.getenv("VALIDATION_CONCURRENT_FIELDS", "1") not in ("0", "false", "False")

# Scenario names used by Model.save()
SCENARIO_DEFAULT = "default"
SCENARIO_CREATE = "create"
SCENARIO_UPDATE = "update"
