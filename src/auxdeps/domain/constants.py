from __future__ import annotations

"""
Domain Constants.

Centralizes the sigil syntax, the reserved placeholder naming and the
names of the platform's built-in query functions and state tags.
"""

from typing import Dict

# -----------------------------------------------------------------------------
# SIGIL SYNTAX
# -----------------------------------------------------------------------------

TAG_SIGIL = "#"
FILE_SIGIL = "@"

# Sigil -> dependency node type
SIGIL_KINDS: Dict[str, str] = {
    TAG_SIGIL: "tag",
    FILE_SIGIL: "file",
}

# Reserved identifier prefix substituted for sigils before parsing
PLACEHOLDER_PREFIX = "__auxSigil"

# The implicit receiver of a formula
THIS_IDENTIFIER = "this"

# Path component contributed by a call segment in member names
CALL_SEGMENT = "()"

# -----------------------------------------------------------------------------
# BUILT-IN QUERY FUNCTIONS
# -----------------------------------------------------------------------------

GET_BOT = "getBot"
GET_BOTS = "getBots"
GET_BOTS_IN_CONTEXT = "getBotsInContext"
GET_BOTS_IN_STACK = "getBotsInStack"
GET_NEIGHBORING_BOTS = "getNeighboringBots"
GET_BOT_TAG_VALUES = "getBotTagValues"
GET_TAG = "getTag"

PLAYER_IS_DESIGNER = "player.isDesigner"
PLAYER_HAS_FILE_IN_INVENTORY = "player.hasFileInInventory"
PLAYER_GET_MENU_CONTEXT = "player.getMenuContext"
PLAYER_GET_INVENTORY_CONTEXT = "player.getInventoryContext"
PLAYER_CURRENT_CONTEXT = "player.currentContext"

# -----------------------------------------------------------------------------
# STATE TAGS READ BY PLAYER BUILT-INS
# -----------------------------------------------------------------------------

DESIGNERS_TAG = "aux.designers"
USER_MENU_CONTEXT_TAG = "aux._userMenuContext"
USER_INVENTORY_CONTEXT_TAG = "aux._userInventoryContext"
USER_CONTEXT_TAG = "aux._userContext"

# Tags of a bot's position within a context
STACK_POSITION_SUFFIXES = ("x", "y")
