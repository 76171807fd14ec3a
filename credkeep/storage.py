import os
import json
from typing import Any, Dict, List

def ensure_dir_exists(path: str) -> None:
    d = os.path.dirname(path)
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Atomically write bytes to 'path' by writing to a temp file and renaming.
    """
    ensure_dir_exists(path)
    tmp = path + ".tmp"
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)

def read_text(path: str) -> str:
    # utf-8-sig drops the BOM spreadsheet exports like to add
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()

def read_json_bytes(b: bytes) -> Any:
    return json.loads(b.decode("utf-8"))

def dump_json_bytes(obj: Any) -> bytes:
    return json.dumps(obj, ensure_ascii=False, indent=2, default=str).encode("utf-8")

def load_credentials(path: str) -> List[Dict[str, Any]]:
    """
    Load stored credentials from a JSON file holding either a list of
    records or {"credentials": [...]}.
    """
    with open(path, "rb") as f:
        data = read_json_bytes(f.read())
    if isinstance(data, dict):
        data = data.get("credentials", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of credentials")
    return [c for c in data if isinstance(c, dict)]

def save_credentials(path: str, records: List[Dict[str, Any]]) -> None:
    atomic_write_bytes(path, dump_json_bytes({"credentials": records}))
