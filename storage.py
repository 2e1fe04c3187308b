import json
import logging
import os
import tempfile

from cryptography.fernet import Fernet, InvalidToken
from firebase_admin import db
from firebase_admin.exceptions import FirebaseError

from errors import PersistenceReadFailure, PersistenceWriteFailure

logger = logging.getLogger(__name__)

DEFAULT_SLOT_NAME = "habitData"


# =====================================================
# CODECS: record <-> stored text
# =====================================================
class JsonCodec:
    def encode(self, data: dict) -> str:
        return json.dumps(data)

    def decode(self, text: str):
        try:
            return json.loads(text)
        except (TypeError, ValueError, RecursionError) as e:
            raise PersistenceReadFailure(f"Stored data is not valid JSON: {e}") from e


class FernetCodec(JsonCodec):
    """
    JSON encrypted with Fernet, the way user data blobs are kept encrypted at rest.
    A token written with another key decodes as a read failure.
    """

    def __init__(self, key: str):
        self.fernet = Fernet(key.encode())

    def encode(self, data: dict) -> str:
        json_str = super().encode(data)
        return self.fernet.encrypt(json_str.encode()).decode()

    def decode(self, token: str):
        try:
            decrypted = self.fernet.decrypt(token.encode()).decode()
        except (InvalidToken, AttributeError) as e:
            raise PersistenceReadFailure(
                "Error decrypting data. Data may be corrupted or the encryption key is invalid."
            ) from e
        return super().decode(decrypted)


# =====================================================
# SLOTS: a single named place holding the stored text
# =====================================================
class MemorySlot:
    def __init__(self, text=None):
        self.text = text
        self.writes = 0

    def read(self):
        return self.text

    def write(self, text: str):
        self.text = text
        self.writes += 1


class LocalFileSlot:
    def __init__(self, directory, name=DEFAULT_SLOT_NAME):
        self.directory = os.fspath(directory)
        self.name = name

    @property
    def path(self) -> str:
        return os.path.join(self.directory, f"{self.name}.json")

    def read(self):
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceReadFailure(f"Could not read {self.path}: {e}") from e

    def write(self, text: str):
        # Written to a temp file in the same directory, then renamed over the slot.
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{self.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise PersistenceWriteFailure(f"Could not write {self.path}: {e}") from e


class FirebaseSlot:
    """Slot stored in the Firebase Realtime Database under '{root}/{name}'."""

    def __init__(self, root="pulse", name=DEFAULT_SLOT_NAME):
        self.root = root.strip("/")
        self.name = name

    @property
    def path(self) -> str:
        return f"{self.root}/{self.name}"

    def read(self):
        try:
            value = db.reference(self.path).get()
        except (FirebaseError, ValueError) as e:
            raise PersistenceReadFailure(f"Could not read {self.path} from Firebase: {e}") from e
        if value is None:
            return None
        if not isinstance(value, str):
            # Record stored as a native JSON tree rather than text.
            return json.dumps(value)
        return value

    def write(self, text: str):
        try:
            db.reference(self.path).set(text)
        except (FirebaseError, ValueError) as e:
            raise PersistenceWriteFailure(f"Could not write {self.path} to Firebase: {e}") from e
