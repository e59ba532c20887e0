from tripsettle.display import display_name, settlement_lines
from tripsettle.models import DebtSummary, ExpenseRecord, ParticipantId, PayloadError, Transfer
from tripsettle.settlement import aggregate, calculate_settlements, even_split, minimize, summarize

__version__ = "0.1.0"
