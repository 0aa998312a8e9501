from constants import REDIS_ROOMS_KEY

REDIS_ROOMS_HASH = REDIS_ROOMS_KEY # hash - field per room code, value = room JSON document
ROOM_DELETE_AT_PATH = "roomInfo/deleteAt" # epoch milliseconds, optional

# **Example `rooms` hash entry**
# - field = room code, e.g. `2cn6j`
# - value = `{"roomInfo": {"deleteAt": 1735689600000, "name": "..."}, "players": {...}}`
# - `roomInfo.deleteAt` may be missing on legacy rooms; those get swept too
