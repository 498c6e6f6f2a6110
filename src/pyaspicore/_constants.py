"""Internal constants shared across the library."""

#: Value stored in ``PositionRecord.protocol`` for every decoded fix.
PROTOCOL_NAME = "aspicore"

IDENTITY_PREFIX = "IMEI"
RMC_PREFIX = "$GPRMC"
GGA_PREFIX = "$GPGGA"

#: Two-digit RMC years below the pivot are offset into the 21st century,
#: the rest into the 20th (the ``%y`` convention of ``time.strptime``).
YEAR_OFFSET = 2000
YEAR_PIVOT = 69

USER_AGENT = "pyaspicore"
