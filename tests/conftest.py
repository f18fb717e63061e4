import os
import sys
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# Set environment variables for testing
os.environ["DB_PATH"] = "test.db"
os.environ["DB_POOL_MAX_SIZE"] = "3"
os.environ["DB_ACQUIRE_TIMEOUT_SEC"] = "1"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_DIR"] = "/tmp/test-logs"
