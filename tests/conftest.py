"""Global test fixtures."""

import os

# Keep Config from picking up a developer's YAML file or data dir.
# This must happen at module load time, before test modules build Config.
os.environ.pop("LODGE_CONFIG_FILE", None)
os.environ.setdefault("LODGE_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
