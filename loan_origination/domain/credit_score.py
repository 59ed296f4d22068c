"""CIBIL score generator - random placeholder, not derived from user data"""

import random
from typing import Optional
from loan_origination.domain.models import CreditScore

MIN_SCORE = 300
MAX_SCORE = 900


def generate_random_score(rng: Optional[random.Random] = None) -> int:
    """Uniform integer in [300, 900] inclusive"""
    rng = rng or random
    return rng.randint(MIN_SCORE, MAX_SCORE)


def categorize_score(score: int) -> str:
    """
    Map a score to its category.

    Bands:
    - 750+:    Excellent
    - 700-749: Very Good
    - 650-699: Good
    - 550-649: Fair
    - below:   Poor
    """
    if score >= 750:
        return "Excellent"
    elif score >= 700:
        return "Very Good"
    elif score >= 650:
        return "Good"
    elif score >= 550:
        return "Fair"
    else:
        return "Poor"


def generate_credit_score(rng: Optional[random.Random] = None) -> CreditScore:
    """Main entry point: generate a score, categorize it and format the message"""
    score = generate_random_score(rng)
    category = categorize_score(score)

    return CreditScore(
        score=score,
        category=category,
        message=f"Your CIBIL score is {score}, which is categorized as {category}.",
    )
