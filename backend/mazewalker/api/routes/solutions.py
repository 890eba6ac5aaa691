"""Solution routes for listing and retrieving stored solutions."""

from fastapi import APIRouter, HTTPException, Path, status

from mazewalker.api.deps import SettingsDep
from mazewalker.schemas.solution import SolutionListResponse, SolutionRecord
from mazewalker.services.solution_service import (
    SolutionFileError,
    load_all_solutions,
    load_solution,
    solution_path_for,
    summarize,
)

router = APIRouter(prefix="/solutions", tags=["Solutions"])


@router.get(
    "",
    response_model=SolutionListResponse,
)
async def list_solutions(settings: SettingsDep) -> SolutionListResponse:
    """List stored solutions.

    Grid data is not included - use GET /v1/solutions/{name} for the record.
    """
    if not settings.solutions_dir.is_dir():
        return SolutionListResponse(solutions=[], total=0)

    summaries = [summarize(record) for record in load_all_solutions(settings.solutions_dir)]
    return SolutionListResponse(solutions=summaries, total=len(summaries))


@router.get(
    "/{name}",
    response_model=SolutionRecord,
)
async def get_solution(
    settings: SettingsDep,
    name: str = Path(..., pattern="^[A-Za-z0-9_-]{1,64}$"),
) -> SolutionRecord:
    """Get a stored solution with its full grid."""
    try:
        return load_solution(solution_path_for(settings.solutions_dir, name))
    except FileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Solution not found: {name}",
        )
    except SolutionFileError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )
