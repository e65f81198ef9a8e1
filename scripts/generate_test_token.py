#!/usr/bin/env python3
"""Generate JWT tokens for calling the catalog API by hand."""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.auth import create_access_token
from src.domain.reference_data import ADMIN_USER_ID

# Admin token for the seeded admin user (can filter by status, create badges)
admin_token = create_access_token(ADMIN_USER_ID, roles=["admin"], email="admin@badger.com")
print(f"Admin Token:\n{admin_token}\n")

# Member token (active badges only)
member_token = create_access_token("member-test", roles=["member"])
print(f"Member Token:\n{member_token}")
