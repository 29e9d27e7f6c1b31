"""
Hospital Data File Layout
Versioned, big-endian binary format for the whole record store.
"""

import struct

MAGIC = b"HMSD"
FORMAT_VERSION = 1

# =============================================================================
# Preamble: magic + uint16 format version
# =============================================================================
PREAMBLE = struct.Struct(">4sH")

# =============================================================================
# Header: four record counts, then four next-id counters (int32 each)
#   patients, diseases, doctors, appointments
# =============================================================================
HEADER = struct.Struct(">8i")

# =============================================================================
# Field primitives
# =============================================================================
INT32 = struct.Struct(">i")
STR_LEN = struct.Struct(">I")  # byte length of the UTF-8 text that follows

# =============================================================================
# Record layouts, in write order. "i" is an int32, "s" a length-prefixed string.
# =============================================================================
PATIENT_FIELDS = (
    ("id", "i"),
    ("name", "s"),
    ("age", "i"),
    ("gender", "s"),
    ("phone", "s"),
    ("disease", "s"),
    ("doctor_id", "i"),
)

DISEASE_FIELDS = (
    ("id", "i"),
    ("name", "s"),
    ("symptoms", "s"),
    ("treatment", "s"),
)

DOCTOR_FIELDS = (
    ("id", "i"),
    ("name", "s"),
    ("specialization", "s"),
    ("phone", "s"),
)

APPOINTMENT_FIELDS = (
    ("id", "i"),
    ("patient_id", "i"),
    ("doctor_id", "i"),
    ("date", "s"),
    ("time", "s"),
)
