"""
Privilege Drop

When installed with elevated effective ids (so every user can write the
shared database), the process keeps them only until its database work is
done. SQLite creates the rollback journal beside the database at write
time, so the drop comes after the handler's transaction has committed.
"""

import os

from expense_tracker.utils.logger import get_logger


logger = get_logger(__name__)


def drop_privileges() -> bool:
    """
    Permanently reset real, effective and saved uid/gid to the real ids
    of the invoking user.

    Returns:
        True if privileges were dropped, False if there was nothing to drop
        (or the platform has no uid model)

    Raises:
        OSError: If the ids could not be reset
    """
    if not hasattr(os, "geteuid"):
        return False

    real_uid, real_gid = os.getuid(), os.getgid()
    if os.geteuid() == real_uid and os.getegid() == real_gid:
        return False

    # Group first: dropping the uid removes the right to change the gid
    if hasattr(os, "setresuid"):
        os.setresgid(real_gid, real_gid, real_gid)
        os.setresuid(real_uid, real_uid, real_uid)
    else:
        os.setgid(real_gid)
        os.setuid(real_uid)
    logger.debug("privileges_dropped", uid=real_uid, gid=real_gid)
    return True
