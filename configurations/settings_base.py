# configurations/settings_base.py
"""
Base configuration classes and environment handling.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class EnvironmentVariables:
    """
    Location of the dotenv file read at import time.
    """

    env_file_path: Optional[str] = os.getenv("ENV_FILE", ".env")
