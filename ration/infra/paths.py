from ration.utilities import config

# Centralized paths for local data files
DATA_DIR = config.DATA_DIR.resolve()
DRAFTS_FILE = DATA_DIR / 'planner_state.json'

__all__ = ['DATA_DIR', 'DRAFTS_FILE']
