"""
Ski recommendation engine.

Responsibilities:
- Accept a completed wizard preference set (gender, ability, piste, speed,
  turns, price range, height).
- Score every catalog item on the soft preference dimensions.
- Drop items failing the hard gender and price-ceiling constraints.
- Return the top matches with a match percentage, a progress-bar colour and
  the recommended ski length.
"""
