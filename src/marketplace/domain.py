"""Campus Marketplace bounded context.

Students buy from campus vendors, vendors manage listings and orders, and
administrators approve vendors and listings. Wallet settlement happens in the
Order Ledger at checkout; everything else is plain CQRS aggregates.
"""

import os

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir=os.getenv("MARKETPLACE_LOG_DIR", "logs") or None, log_file_prefix="marketplace")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
