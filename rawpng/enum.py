from enum import Flag


class Compliant(Flag):
    '''It indicates how strictly the data must follow the format'''
    NONE    = 0
    ENUM    = 1 << 0
    MAGIC   = 1 << 1
    INHERIT = 1 << 2
    PROFILE = 1 << 3  # refuse to decode what the pixel pipeline can't represent


DEFAULT_COMPLIANT = Compliant.ENUM | Compliant.MAGIC | Compliant.PROFILE
