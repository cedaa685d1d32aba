from fastapi import APIRouter, Depends
from tripsplit.core.dependencies import get_current_user, get_store
from tripsplit.db.store import RecordStore
from tripsplit.schemas.package import AssignPackage, AssignPackageOut
from tripsplit.services.package_services import assign_package_to_group

router = APIRouter()

@router.post("/{package_id}/assign", response_model=AssignPackageOut)
async def assign(package_id: int, data: AssignPackage, store: RecordStore = Depends(get_store), current_user = Depends(get_current_user)):
    return await assign_package_to_group(store, package_id, data, current_user)
