"""
Configuration Module

This file stores static configuration variables for the projector.
Only deployment-level settings can be overridden from the environment
(or a project-root .env file); the CAPM constants are fixed.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# US 10-year Treasury yield used as the risk-free rate
RISK_FREE_RATE = 0.0425

# Beta contract: S&P 500 benchmark, monthly interval, 12-month window
BENCHMARK_INDEX = "^GSPC"
BETA_INTERVAL = "1mo"
BETA_OBSERVATIONS = 12

# Newton Analytics beta endpoint
NEWTON_BETA_URL = os.getenv(
    "NEWTON_BETA_URL", "https://api.newtonanalytics.com/stock-beta/"
)

# Per outbound call timeout in seconds
REQUEST_TIMEOUT = float(os.getenv("CAPM_REQUEST_TIMEOUT", "10"))

LOG_LEVEL = os.getenv("CAPM_LOG_LEVEL", "INFO")

# Folder for generated charts
OUTPUT_DIR = os.getenv("CAPM_OUTPUT_DIR", str(PROJECT_ROOT / "outputs"))

# Longest projection horizon accepted, in years
MAX_YEARS = 100
