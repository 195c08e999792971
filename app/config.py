"""
League settings
"""
from typing import Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class SupabaseConfig(BaseSettings):
    """Supabase settings"""

    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase service or anon key")

    class Config:
        env_prefix = ""
        case_sensitive = False


class ScoringConfig(BaseSettings):
    """Scoring and handicap settings"""

    scoring_policy: Literal["stroke_bands", "placement", "par_relative"] = Field(
        default="stroke_bands", description="Points table used for new scores"
    )
    handicap_max_rounds: int = Field(default=8, ge=1, description="Best differentials averaged")
    handicap_multiplier: float = Field(default=1.0, gt=0, description="Applied to the raw index (USGA: 0.96)")
    handicap_decimals: Optional[int] = Field(default=None, ge=0, description="Rounding of the stored handicap")

    class Config:
        env_prefix = "GOLF_"
        case_sensitive = False


class LoggingConfig(BaseSettings):
    """Log sinks"""

    log_level: str = Field(default="INFO", description="stderr level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")
    log_rotation: str = Field(default="1 day", description="File rotation")
    log_retention: str = Field(default="30 days", description="File retention")

    class Config:
        env_prefix = ""
        case_sensitive = False


# Global settings instances
supabase_config = SupabaseConfig()
scoring_config = ScoringConfig()
logging_config = LoggingConfig()
