# cbb_dashboard/models/dashboard_types.py
from typing_extensions import TypedDict, Literal
from typing import List, Optional

HomeAway = Literal["Home", "Away", "Neutral"]
OverUnder = Literal["Over", "Under", "Push"]


class Team(TypedDict):
    id: str
    name: str


class LeaguePoint(TypedDict):
    date: str
    value: float


class SeriesPoint(TypedDict):
    date: str
    teamValue: float
    leagueValue: Optional[float]


class BoxScore(TypedDict):
    h1: Optional[int]
    h2: Optional[int]
    ot: Optional[int]
    total: Optional[int]


class GameRow(TypedDict):
    id: Optional[str]
    team_id: str
    opponent_id: Optional[str]
    opponent_name: str
    game_date: Optional[str]
    home_away: HomeAway
    team_score: int
    opponent_score: int
    actual_score: str
    team_box: BoxScore
    opp_box: BoxScore
    has_ot: bool
    winner_id: Optional[str]
    open_total: Optional[float]
    close_total: Optional[float]
    game_total: Optional[float]
    kp_total: Optional[float]
    predicted_score: Optional[float]
    predicted_possessions: Optional[float]
    win_probability: Optional[str]
    integrity_warning: Optional[str]


class RecordSummary(TypedDict):
    games: int
    wins: int
    losses: int
    winRate: float
    avgMargin: float
    avgMarginDisplay: str


class VegasSummary(TypedDict):
    totalGames: int
    countedGames: int
    overs: int
    unders: int
    pushes: int
    overPct: float
    underPct: float
    pushPct: float
    beatPrediction: int
    beatPredictionRate: float
    trend: Literal["Over", "Under", "Balanced"]


class ProfileAxis(TypedDict):
    subject: str
    stat: str
    team: float
    league: float
    fullMark: float


class Comparison(TypedDict):
    teamValue: Optional[float]
    leagueValue: Optional[float]
    delta: Optional[float]
    teamDisplay: str
    leagueDisplay: str
    deltaDisplay: str


class BookLines(TypedDict):
    book: str
    openTotal: Optional[float]
    closeTotal: Optional[float]
    sideOpen: Optional[float]
    sideClose: Optional[float]


class ScheduleEntry(TypedDict):
    gameDate: Optional[str]
    team1: Team
    team2: Team
    homeTeamId: Optional[str]
    predictedWinner: Optional[Team]
    predictedScore: Optional[str]
    predictedPossessions: Optional[float]
    location: Optional[str]
    lines: BookLines


class GameLog(TypedDict):
    games: List[GameRow]
    record: RecordSummary
    vegas: VegasSummary
    headToHead: bool
