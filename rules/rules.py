BOX_SIZE = 3  # side of a subsquare (k)
UNIT_SIZE = BOX_SIZE * BOX_SIZE  # cells in a row, column and subsquare (N)
FIELD_SIZE = UNIT_SIZE * UNIT_SIZE  # cells on the whole field

MIN_BOX_SIZE = 1
MAX_BOX_SIZE = 5

# masks are word-sized bitsets: bit max_value must stay below MASK_BITS for every box size
MASK_BITS = 64

# valid values are >= 0; '1' decodes to MIN_VALUE
MIN_VALUE = 5
MAX_VALUE = MIN_VALUE + UNIT_SIZE - 1
MAX_MIN_VALUE = MASK_BITS - MAX_BOX_SIZE * MAX_BOX_SIZE

UNKNOWN_CHAR = "0"
FIRST_VALUE_CHAR = "1"

USAGE_EXIT_STATUS = 255
MAX_COUNT_EXIT_STATUS = 254
