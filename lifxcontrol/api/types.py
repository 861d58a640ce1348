"""
API-level constants.

Message types live with the wire encoder (lifxcontrol.io.MessageType); this
module holds the values the request orchestrator fills into each header.
"""


class Const:
    """API-level constants"""
    # Request correlation
    DEFAULT_SOURCE = 321
    DEFAULT_SEQUENCE = 156

    # Power levels
    POWER_ON = 0xFFFF
    POWER_OFF = 0x0000

    # Whitepoint used when a colour is given without one
    DEFAULT_KELVIN = 3500

    # Transition time for set-state, in milliseconds
    DEFAULT_DURATION = 0
