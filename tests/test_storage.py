import os
import json
import tempfile

from credkeep.storage import atomic_write_bytes, read_text, load_credentials, save_credentials

def test_atomic_write_creates_dirs():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "a", "b", "out.bin")
        atomic_write_bytes(path, b"hello")
        with open(path, "rb") as f:
            assert f.read() == b"hello"
        assert not os.path.exists(path + ".tmp")

def test_read_text_strips_bom():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "export.csv")
        with open(path, "wb") as f:
            f.write("\ufeffService,Username,Password".encode("utf-8"))
        assert read_text(path) == "Service,Username,Password"

def test_credentials_round_trip():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "creds.json")
        records = [{"name": "Gmail", "username": "u", "password": "p"}]
        save_credentials(path, records)
        assert load_credentials(path) == records

def test_load_plain_list_and_bad_shape():
    with tempfile.TemporaryDirectory() as td:
        path = os.path.join(td, "creds.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump([{"name": "A"}, "junk"], f)
        assert load_credentials(path) == [{"name": "A"}]

        with open(path, "w", encoding="utf-8") as f:
            json.dump("nope", f)
        try:
            load_credentials(path)
            raised = False
        except ValueError:
            raised = True
        assert raised
