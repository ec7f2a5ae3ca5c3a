"""Services: money helpers, Supabase database access and checkout."""
