from pathlib import Path

from fitlog.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized paths for data files (single source of truth)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()


def collection_file(data_dir: Path, collection: str) -> Path:
    return Path(data_dir) / f"{collection}.json"


__all__ = ['DATA_DIR', 'collection_file']
