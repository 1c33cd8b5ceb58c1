import os, sys
import warnings
from pathlib import Path

# Add src/ to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Ensure required environment variables for config validation
os.environ.setdefault("DISCORD_API_TOKEN", "test-token")
os.environ.setdefault("COMMAND_PREFIX", "/")
os.environ.setdefault("MANAGER_ROLE_IDS", "777")
os.environ.setdefault("COMMAND_DELETE_DELAY", "0")
os.environ.setdefault("REPLACED_DELETE_DELAY", "0")

# Silence deprecation warnings surfaced from third-party dependencies during tests
warnings.filterwarnings(
    "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
)
warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)


def pytest_configure(config):
    warnings.filterwarnings(
        "ignore", category=DeprecationWarning, module=r"^discord\\.player$"
    )
    warnings.filterwarnings("ignore", "'audioop' is deprecated", DeprecationWarning)
