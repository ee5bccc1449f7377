# cbb_dashboard/core/config.py
import os

# ------------ Backends ------------
DATABASE_URL = os.getenv("DATABASE_URL")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
SUPABASE_TIMEOUT = float(os.getenv("SUPABASE_TIMEOUT", "10"))

# ------------ Collections ------------
TEAMS_TABLE = os.getenv("TEAMS_TABLE", "teams")
TEAM_DAILY_STATS_TABLE = os.getenv("TEAM_DAILY_STATS_TABLE", "daily_team_stats")
LEAGUE_TRENDS_TABLE = os.getenv("LEAGUE_TRENDS_TABLE", "league_daily_trends")
GAMES_TABLE = os.getenv("GAMES_TABLE", "games")
SCHEDULE_TABLE = os.getenv("SCHEDULE_TABLE", "day_schedule")

# ------------ Dashboard defaults ------------
AVAILABLE_SEASONS = [2025, 2024, 2023, 2022]
DEFAULT_SEASON = int(os.getenv("DEFAULT_SEASON", "2025"))
BOOK_OF_RECORD = os.getenv("BOOK_OF_RECORD", "DraftKings")
