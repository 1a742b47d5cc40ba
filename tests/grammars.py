PAREN = ["S -> A", "A -> ( A )", "A -> two", "two -> a", "two -> b"]

EXPR = [
	"E -> T E'",
	"E' -> + T E'",
	"E' -> '",
	"T -> F T'",
	"T' -> * F T'",
	"T' -> '",
	"F -> ( E )",
	"F -> id",
]

LEFT_RECURSIVE = ["E -> E + T", "E -> T", "T -> id"]

INDIRECT_LEFT_RECURSIVE = ["A -> B x", "B -> A y", "B -> c"]

NULLABLE_PREFIX = ["S -> B C d", "B -> b", "B -> '", "C -> c", "C -> '"]

# FOLLOW(A) and FOLLOW(B) inherit from each other.
FOLLOW_CYCLE = ["S -> A z", "A -> a B", "B -> b A", "B -> '", "S -> B w"]
