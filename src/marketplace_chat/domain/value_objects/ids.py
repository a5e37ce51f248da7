from __future__ import annotations

import re

# User and listing ids: Mongo-style hex ids, UUIDs and slugs all fit.
IDENTIFIER_RE = re.compile(r"^[A-Za-z0-9-]{1,64}$")

# Joins the parts of a conversation key; excluded from IDENTIFIER_RE.
KEY_SEPARATOR = "_"
