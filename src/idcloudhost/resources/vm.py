"""Virtual machine client."""

import uuid

import structlog

from .. import restapi
from ..restapi.types import OperationResult, VirtualMachine

logger = structlog.get_logger(__name__)

VM_PATH = "/v1/user-resource/vm"


class VirtualMachineClient:
    """Wrapper around the virtual machine endpoints."""

    def __init__(self, api: restapi.Client):
        self.api = api

    def list_vms(self, ctx: restapi.Context) -> list[VirtualMachine]:
        """List every virtual machine of the account."""
        cfg = restapi.RequestConfig(method="GET", path=f"{VM_PATH}/list")
        return restapi.decode(self.api.form_request(ctx, cfg), list[VirtualMachine])

    def get_vm(self, ctx: restapi.Context, vm_id: uuid.UUID) -> VirtualMachine:
        """Fetch a single virtual machine by UUID."""
        cfg = restapi.RequestConfig(
            method="GET",
            path=VM_PATH,
            query={"uuid": str(vm_id)},
        )
        return restapi.decode(self.api.form_request(ctx, cfg), VirtualMachine)

    def start_vm(self, ctx: restapi.Context, vm_id: uuid.UUID) -> VirtualMachine:
        """Power on a virtual machine."""
        return self._power_action(ctx, "start", vm_id)

    def stop_vm(self, ctx: restapi.Context, vm_id: uuid.UUID) -> VirtualMachine:
        """Power off a virtual machine."""
        return self._power_action(ctx, "stop", vm_id)

    def delete_vm(self, ctx: restapi.Context, vm_id: uuid.UUID) -> OperationResult:
        """Delete a virtual machine and its disks."""
        cfg = restapi.RequestConfig(
            method="DELETE",
            path=VM_PATH,
            data={"uuid": str(vm_id)},
        )
        result = restapi.decode(self.api.form_request(ctx, cfg), OperationResult)
        logger.info(
            "Deleted virtual machine",
            vm_uuid=str(vm_id),
            success=result.success,
        )
        return result

    def _power_action(
        self,
        ctx: restapi.Context,
        action: str,
        vm_id: uuid.UUID,
    ) -> VirtualMachine:
        cfg = restapi.RequestConfig(
            method="POST",
            path=f"{VM_PATH}/{action}",
            data={"uuid": str(vm_id)},
        )
        vm = restapi.decode(self.api.form_request(ctx, cfg), VirtualMachine)
        logger.info("Virtual machine power action", action=action, vm_uuid=str(vm_id))
        return vm
