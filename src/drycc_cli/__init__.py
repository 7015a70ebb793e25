"""
drycc-cli, the command line client for the Drycc Workflow controller.

Authenticate against a controller, keep a session profile on disk,
and drive apps, builds, config, routing and storage over the REST API.
"""

import os

__version__ = "0.1.0"

# Controller API version this client was written against.
API_VERSION = "2.3"

PROG_NAME = "drycc"
USER_AGENT = f"Drycc Client v{__version__}"

PROFILE_ENV = "DRYCC_PROFILE"
DRINK_ENV = "DRYCC_DRINK_OF_CHOICE"
DEBUG_ENV = "DRYCC_DEBUG"

CONFIG_DIR = os.path.join("~", ".drycc")
DEFAULT_PROFILE = "client"
DEFAULT_LIMIT = 100
