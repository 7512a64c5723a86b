"""GitHub bridge: local git context mapped onto the GitHub API."""

# Initialize logging when package is imported
from .utils.logger import LoggerSetup

LoggerSetup.setup_logging()

__version__ = "0.1.0"
