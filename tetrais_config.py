CONFIG = {
    "CELL_SIZE": 30,
    "DAS_MS": 170,
    "ARR_MS": 30,
    "SOFT_DROP_MS": 50,
    "CASCADE_STEP_MS": 500,
    "SPITE_MODE": True,
    # Selection probabilities aligned to the worst->best suggestion ranking
    "SUGGESTION_WEIGHTS": [0.30, 0.25, 0.18, 0.12, 0.08, 0.05, 0.02],
    "SUGGESTION_CACHE_SIZE": 256,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}
