"""Go Fish belief tracking and match engine."""

from gofish.probability import Known, MoreThan, Unknown, combine_add, combine_sub
from gofish.deck import BeliefDeck, KnownHand, NUM_RANKS, NUM_SUITS, STARTING_CARDS
from gofish.errors import EmptyPoolDraw, GoFishError, IllegalMove, InvalidTransferAmount
from gofish.seating import absolute_to_relative, relative_to_absolute
from gofish.moves import Ask, Draw, Move, move_from_id, move_to_id
from gofish.belief_state import SeatBelief, replay
from gofish.features import encode_belief
from gofish.game import MatchEngine, TurnRecord, deal_hands, sample_rank
