import enum


class Context(enum.IntEnum):
    """Where the decoded text came from.

    ``ATTRIBUTE`` is for attribute values, where named references without a
    trailing semicolon are only expanded on an exact match and never when
    followed by ``=``. ``GENERAL`` is for everything else.
    """

    GENERAL = 0
    ATTRIBUTE = 1
