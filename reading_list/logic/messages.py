"""User-facing messages shared by the parser and the commands."""

MESSAGE_UNKNOWN_COMMAND = "Unknown command"
MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{}"
MESSAGE_INVALID_ENTRY_DISPLAYED_INDEX = "The entry index provided is invalid"
MESSAGE_ENTRIES_LISTED_OVERVIEW = "{} entries listed!"
MESSAGE_INVALID_INDEX = "Index is not a non-zero unsigned integer."
FILE_OPS_ERROR_MESSAGE = "Could not save data to file: "
