"""Product catalog service.

Record-level product operations over message-style RPC, with a
soft-delete lifecycle, role-based visibility and user enrichment
from the identity service.
"""

__version__ = "0.1.0"
