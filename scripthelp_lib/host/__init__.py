"""Host primitives: files, secure strings, HTTP, dialogs, notifications, photos."""

from .file_manager import FileManager
from .keychain import Keychain
from .request import Request
from .alert import Alert
from .notification import Notification
from .photos import PhotoLibrary

__all__ = ["FileManager", "Keychain", "Request", "Alert", "Notification", "PhotoLibrary"]
