"""
Supabase data access
"""
from .supabase_client import SupabaseDB, get_supabase_client

__all__ = ["SupabaseDB", "get_supabase_client"]
