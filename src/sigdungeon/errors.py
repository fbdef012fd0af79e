class SigDungeonError(Exception):
    """Base error for signature dungeon domain exceptions."""


class SignatureError(SigDungeonError, ValueError):
    """Raised when a signature is built from values of the wrong shape."""


class SignatureIndexError(SigDungeonError, IndexError):
    """Raised when a signature dimension index is out of range."""


class ConfigError(SigDungeonError):
    """Raised when a configuration file or override cannot be validated."""


class InventoryFullError(SigDungeonError):
    """Raised when an item cannot be placed because the inventory is at capacity."""


class SlotLockedError(SigDungeonError):
    """Raised when using a dungeon slot that has not been unlocked yet."""


class EmptySlotError(SigDungeonError):
    """Raised when starting a dungeon from a slot with no item in it."""


class NoActiveRunError(SigDungeonError):
    """Raised when completing a dungeon run that was never started."""


class RunInProgressError(SigDungeonError):
    """Raised when starting a dungeon while another run is still active."""
