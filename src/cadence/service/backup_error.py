# SPDX-License-Identifier: MIT


class BackupError(Exception):
    """Base class for failures surfaced to the user as a single message."""

    pass


class BackupFormatError(BackupError):
    """The file is not a parseable backup envelope."""

    def __init__(self, message: str = "The backup file is not in the correct format"):
        super().__init__(message)


class BackupVersionError(BackupError):
    """The backup was written by a newer release than this one supports."""

    def __init__(
        self, message: str = "This backup was created with a newer version of the app"
    ):
        super().__init__(message)


class BackupReadError(BackupError):
    def __init__(self, message: str = "Could not read the backup file"):
        super().__init__(message)


class BackupWriteError(BackupError):
    pass
