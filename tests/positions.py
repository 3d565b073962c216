"""FEN positions shared across test modules."""

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"
QUEEN_VS_KING = "4k3/8/8/8/8/8/8/3QK3 w - - 0 1"
BACK_RANK_MATE_IN_ONE = "6k1/5ppp/8/8/8/8/5PPP/3R2K1 w - - 0 1"
HANGING_QUEEN = "4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1"
ITALIAN = "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"
PROMOTION = "8/4P3/8/8/8/8/k7/4K3 w - - 0 1"
KING_AND_ROOK = "4k3/8/8/8/8/8/8/4K2R w K - 0 1"
