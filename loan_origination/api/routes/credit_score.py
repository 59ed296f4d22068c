"""GET /cibil-score - random CIBIL score"""

from fastapi import APIRouter

from loan_origination.api.schemas import CreditScoreResponse
from loan_origination.domain.credit_score import generate_credit_score
from loan_origination.infrastructure.observability.metrics import credit_score_counter

router = APIRouter()


@router.get("/cibil-score", response_model=CreditScoreResponse)
def get_credit_score():
    """Generate a score in [300, 900]; not derived from any stored data"""
    credit_score = generate_credit_score()
    credit_score_counter.labels(category=credit_score.category).inc()

    return CreditScoreResponse(
        score=credit_score.score,
        category=credit_score.category,
        message=credit_score.message,
    )
