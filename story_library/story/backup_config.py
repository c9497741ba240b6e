"""Story library backup configuration and permission constants."""

import stat
from datetime import datetime

# Retention: only this many backups are kept after each backup run
DEFAULT_MAX_BACKUPS = 10

# How often the scheduler backs up the library
DEFAULT_INTERVAL_MINUTES = 20

# Entries in the backups folder starting with this are never counted or pruned
HIDDEN_PREFIX = "."

# Permissions: owner write bit toggled on the story directory (POSIX)
OWNER_WRITE_BIT = stat.S_IWUSR

# Permissions: absolute modes applied to each file on Windows
WINDOWS_WRITABLE_MODE = 0o666
WINDOWS_READ_ONLY_MODE = 0o444


def backup_name(ts: datetime) -> str:
    """Directory name for a backup taken at ``ts``.

    Fields are not zero-padded: 2024-3-7 9-5-2-41
    """
    return (
        f"{ts.year}-{ts.month}-{ts.day} "
        f"{ts.hour}-{ts.minute}-{ts.second}-{ts.microsecond // 1000}"
    )
