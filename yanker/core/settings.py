"""User-facing settings - persisted to ~/.config/yanker/settings.json.

Covers the editing session (undo depth, chatter), the default on-disk graph
format and where the HTTP API binds.
"""

import json
from pathlib import Path

CONFIG_PATH = Path.home() / '.config' / 'yanker' / 'settings.json'

DEFAULTS = {
    'undo_max_size': 100,
    'default_format': 'binary',   # 'binary' or 'json'
    'verbose': False,             # session prints every accepted/rejected edit
    'server_host': '127.0.0.1',
    'server_port': 5000,
}


class Settings:
    def __init__(self, path=None):
        self.path = Path(path) if path else CONFIG_PATH
        self.undo_max_size: int = DEFAULTS['undo_max_size']
        self.default_format: str = DEFAULTS['default_format']
        self.verbose: bool = DEFAULTS['verbose']
        self.server_host: str = DEFAULTS['server_host']
        self.server_port: int = DEFAULTS['server_port']
        self._load()

    def _load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
            self.undo_max_size = int(d.get('undo_max_size', self.undo_max_size))
            self.default_format = str(d.get('default_format', self.default_format))
            self.verbose = bool(d.get('verbose', self.verbose))
            self.server_host = str(d.get('server_host', self.server_host))
            self.server_port = int(d.get('server_port', self.server_port))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"[Settings] Ignoring unreadable {self.path}: {e}")
        if self.default_format not in ('binary', 'json'):
            self.default_format = DEFAULTS['default_format']

    def save(self):
        """Persist current settings to the user config file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump({
                    'undo_max_size': self.undo_max_size,
                    'default_format': self.default_format,
                    'verbose': self.verbose,
                    'server_host': self.server_host,
                    'server_port': self.server_port,
                }, f, indent=2)
        except OSError as e:
            print(f"[Settings] Could not write {self.path}: {e}")  # non-fatal
