"""Block storage client: disk lifecycle, billing and VM attachment."""

import enum
import uuid
from dataclasses import dataclass

import structlog

from .. import restapi
from ..restapi.types import Disk, OperationResult, VirtualMachine

logger = structlog.get_logger(__name__)

DISKS_PATH = "/v1/storage/disks"
ATTACH_PATH = "/v1/user-resource/vm/storage/attach"
DETACH_PATH = "/v1/user-resource/vm/storage/detach"


class ImageType(str, enum.Enum):
    """Kind of source a new disk is created from."""

    OS_BASE = "OS_BASE"
    DISK = "DISK"
    SNAPSHOT = "SNAPSHOT"


@dataclass
class CreateDiskConfig:
    """Parameters of a new disk."""

    size_gb: int
    billing_account_id: int
    source_image_type: ImageType = ImageType.OS_BASE
    source_image: str = ""


class BlockStorageClient:
    """Wrapper around the block storage endpoints."""

    def __init__(self, api: restapi.Client):
        self.api = api

    def list_disks(self, ctx: restapi.Context) -> list[Disk]:
        """List every disk of the account."""
        cfg = restapi.RequestConfig(method="GET", path=DISKS_PATH)
        return restapi.decode(self.api.form_request(ctx, cfg), list[Disk])

    def create_disk(self, ctx: restapi.Context, config: CreateDiskConfig) -> Disk:
        """Create a disk.

        Args:
            ctx: Cancellation context.
            config: Size, billing account and source image of the disk.

        Returns:
            The newly created disk.
        """
        cfg = restapi.RequestConfig(
            method="POST",
            path=DISKS_PATH,
            data={
                "size_gb": str(config.size_gb),
                "billing_account_id": str(config.billing_account_id),
                "source_image_type": ImageType(config.source_image_type).value,
                "source_image": config.source_image,
            },
        )
        disk = restapi.decode(self.api.form_request(ctx, cfg), Disk)
        logger.info("Created disk", disk_uuid=disk.uuid, size_gb=config.size_gb)
        return disk

    def get_disk(self, ctx: restapi.Context, disk_id: uuid.UUID) -> Disk:
        """Fetch a single disk by UUID."""
        cfg = restapi.RequestConfig(method="GET", path=f"{DISKS_PATH}/{disk_id}")
        return restapi.decode(self.api.form_request(ctx, cfg), Disk)

    def delete_disk(self, ctx: restapi.Context, disk_id: uuid.UUID) -> OperationResult:
        """Delete a disk by UUID."""
        cfg = restapi.RequestConfig(method="DELETE", path=f"{DISKS_PATH}/{disk_id}")
        result = restapi.decode(self.api.form_request(ctx, cfg), OperationResult)
        logger.info("Deleted disk", disk_uuid=str(disk_id), success=result.success)
        return result

    def attach_disk_to_vm(
        self,
        ctx: restapi.Context,
        disk_id: uuid.UUID,
        vm_id: uuid.UUID,
    ) -> VirtualMachine:
        """Attach a disk to a virtual machine.

        Returns:
            The virtual machine as described after the change.
        """
        return self._storage_action(ctx, ATTACH_PATH, disk_id, vm_id)

    def detach_disk_from_vm(
        self,
        ctx: restapi.Context,
        disk_id: uuid.UUID,
        vm_id: uuid.UUID,
    ) -> VirtualMachine:
        """Detach a disk from a virtual machine.

        Returns:
            The virtual machine as described after the change.
        """
        return self._storage_action(ctx, DETACH_PATH, disk_id, vm_id)

    def update_disk_billing_account(
        self,
        ctx: restapi.Context,
        disk_id: uuid.UUID,
        billing_account_id: int,
    ) -> Disk:
        """Move a disk to another billing account."""
        cfg = restapi.RequestConfig(
            method="PATCH",
            path=f"{DISKS_PATH}/{disk_id}",
            data={"billing_account_id": str(billing_account_id)},
        )
        return restapi.decode(self.api.form_request(ctx, cfg), Disk)

    def _storage_action(
        self,
        ctx: restapi.Context,
        path: str,
        disk_id: uuid.UUID,
        vm_id: uuid.UUID,
    ) -> VirtualMachine:
        cfg = restapi.RequestConfig(
            method="POST",
            path=path,
            data={"uuid": str(vm_id), "storage_uuid": str(disk_id)},
        )
        return restapi.decode(self.api.form_request(ctx, cfg), VirtualMachine)
