# Global knobs (event-name grammar + logging)
import os

# Event keys look like "name" or "name.namespace"; split on the first one only
NAMESPACE_DELIMITER = "."

# ---------------------------------------------------------------------
# Logging
# The library only creates loggers; emitter.log.configure_logging() applies
# these when an application or test run wants output.
# ---------------------------------------------------------------------
LOGGER_NAME = "emitter"
LOG_LEVEL = os.environ.get("EMITTER_LOG_LEVEL", "WARNING")
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
