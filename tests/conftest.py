import os
import warnings

# Keep test runs independent of a developer's env.local
os.environ.setdefault("ENABLE_OAUTH", "false")
os.environ.setdefault("LOGFIRE_ENABLE", "false")

warnings.filterwarnings("ignore", category=DeprecationWarning, module="beanie.*")

# Import shared fixtures so they are available to all tests
from tests.fixtures.channel_fixtures import *  # noqa: E402, F403
from tests.fixtures.mongo_fixtures import *  # noqa: E402, F403
