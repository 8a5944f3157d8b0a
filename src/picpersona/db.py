from functools import lru_cache
from supabase import create_client, Client
from .config import SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY
from .errors import PersistenceError

@lru_cache(maxsize=1)
def get_client() -> Client:
    # One service-role client per process; results are written from the backend only
    if not (SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY):
        raise PersistenceError("Supabase is not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)")
    return create_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)
