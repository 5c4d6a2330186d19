"""/v1/backup - whole-dataset export and restore"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from account_dashboard.api.dependencies import get_backup_codec, get_clock
from account_dashboard.api.v1.schemas import ImportResponse
from account_dashboard.infrastructure.storage.backup import BackupCodec, backup_filename
from account_dashboard.infrastructure.storage.repositories import Clock

router = APIRouter()


@router.get("/backup/export")
def export_backup(
    codec: BackupCodec = Depends(get_backup_codec),
    clock: Clock = Depends(get_clock),
):
    """Download every stored collection as one JSON document"""
    return Response(
        content=codec.export_data(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{backup_filename(clock())}"'},
    )


@router.post("/backup/import", response_model=ImportResponse)
async def import_backup(
    request: Request,
    codec: BackupCodec = Depends(get_backup_codec),
):
    """
    Restore from an exported document sent as the raw request body.

    Returns 400 when the document is rejected; nothing is written in that case.
    """
    text = (await request.body()).decode("utf-8", errors="replace")
    if not codec.import_data(text):
        raise HTTPException(status_code=400, detail="Failed to import data. Please check the file format.")
    return ImportResponse(imported=True)
