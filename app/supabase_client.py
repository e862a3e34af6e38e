from supabase import create_client

from app.config import settings

# Supabase client (created once, only imported when STORAGE_BACKEND=supabase)
supabase = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
