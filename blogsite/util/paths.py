from pathlib import Path
import os

def resolve_dir(path: str, base: Path) -> Path:
    # allow ~ expansion and paths relative to the site root
    p = Path(os.path.expanduser(str(path)))
    if not p.is_absolute():
        p = (Path(base) / p).resolve()
    return p

def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)
