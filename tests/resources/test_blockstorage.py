"""Tests for the block storage client.

Each operation is checked against the method, request URI and form
values the API expects, and against the decoded result type.
"""

import uuid

import pytest
from mock_server import form_values, json_handler, request_uri

from idcloudhost import restapi
from idcloudhost.resources import blockstorage
from idcloudhost.restapi import types

DISK = {
    "id": 7,
    "uuid": "6f0f6f1a-52f5-4a8e-9d7c-1b8f5d9c1a11",
    "name": "data",
    "size": 10,
    "status": "ACTIVE",
    "billing_account_id": 123,
}
VM = {
    "uuid": "0c2b4e7e-8a7c-4d2b-9c3f-4f6b0e5d2a10",
    "name": "web",
    "status": "running",
}


def test_list_disks(mock_client_server, ctx):
    api, server = mock_client_server(json_handler([DISK]))
    disks = blockstorage.BlockStorageClient(api).list_disks(ctx)

    assert server.last_request.method == "GET"
    assert request_uri(server.last_request) == "/v1/storage/disks"
    assert disks == [types.Disk(**DISK)]


def test_create_disk(mock_client_server, ctx):
    config = blockstorage.CreateDiskConfig(
        size_gb=10,
        billing_account_id=123,
        source_image_type=blockstorage.ImageType.OS_BASE,
        source_image="ubuntu_20.04",
    )
    api, server = mock_client_server(json_handler(DISK))
    disk = blockstorage.BlockStorageClient(api).create_disk(ctx, config)

    request = server.last_request
    assert request.method == "POST"
    assert request_uri(request) == "/v1/storage/disks"
    form = form_values(request)
    assert form["size_gb"] == "10"
    assert form["billing_account_id"] == "123"
    assert form["source_image_type"] == "OS_BASE"
    assert form["source_image"] == "ubuntu_20.04"
    assert disk.uuid == DISK["uuid"]


def test_get_disk(mock_client_server, ctx):
    disk_id = uuid.uuid4()
    api, server = mock_client_server(json_handler(DISK))
    disk = blockstorage.BlockStorageClient(api).get_disk(ctx, disk_id)

    assert server.last_request.method == "GET"
    assert request_uri(server.last_request) == f"/v1/storage/disks/{disk_id}"
    assert disk.size == 10


def test_delete_disk(mock_client_server, ctx):
    disk_id = uuid.uuid4()
    api, server = mock_client_server(json_handler({"success": True}))
    result = blockstorage.BlockStorageClient(api).delete_disk(ctx, disk_id)

    assert server.last_request.method == "DELETE"
    assert request_uri(server.last_request) == f"/v1/storage/disks/{disk_id}"
    assert result.success


def test_attach_disk_to_vm(mock_client_server, ctx):
    disk_id = uuid.uuid4()
    vm_id = uuid.uuid4()
    api, server = mock_client_server(json_handler(VM))
    vm = blockstorage.BlockStorageClient(api).attach_disk_to_vm(ctx, disk_id, vm_id)

    request = server.last_request
    assert request.method == "POST"
    assert request_uri(request) == "/v1/user-resource/vm/storage/attach"
    form = form_values(request)
    assert form["uuid"] == str(vm_id)
    assert form["storage_uuid"] == str(disk_id)
    assert vm.name == "web"


def test_detach_disk_from_vm(mock_client_server, ctx):
    disk_id = uuid.uuid4()
    vm_id = uuid.uuid4()
    api, server = mock_client_server(json_handler(VM))
    blockstorage.BlockStorageClient(api).detach_disk_from_vm(ctx, disk_id, vm_id)

    request = server.last_request
    assert request.method == "POST"
    assert request_uri(request) == "/v1/user-resource/vm/storage/detach"
    form = form_values(request)
    assert form["uuid"] == str(vm_id)
    assert form["storage_uuid"] == str(disk_id)


def test_update_disk_billing_account(mock_client_server, ctx):
    disk_id = uuid.uuid4()
    api, server = mock_client_server(json_handler({**DISK, "billing_account_id": 456}))
    disk = blockstorage.BlockStorageClient(api).update_disk_billing_account(
        ctx,
        disk_id,
        456,
    )

    request = server.last_request
    assert request.method == "PATCH"
    assert request_uri(request) == f"/v1/storage/disks/{disk_id}"
    assert form_values(request)["billing_account_id"] == "456"
    assert disk.billing_account_id == 456


def test_api_error_is_raised(mock_client_server, ctx):
    api, _ = mock_client_server(json_handler({"message": "not found"}, status_code=404))
    with pytest.raises(restapi.ApiError, match="not found"):
        blockstorage.BlockStorageClient(api).get_disk(ctx, uuid.uuid4())


def test_missing_context_is_raised(mock_client_server):
    api, server = mock_client_server(json_handler([]))
    with pytest.raises(restapi.MissingContextError):
        blockstorage.BlockStorageClient(api).list_disks(None)
    assert server.requests == []


def test_image_type_accepts_plain_string(mock_client_server, ctx):
    config = blockstorage.CreateDiskConfig(
        size_gb=20,
        billing_account_id=1,
        source_image_type="SNAPSHOT",
        source_image="snap-1",
    )
    api, server = mock_client_server(json_handler(DISK))
    blockstorage.BlockStorageClient(api).create_disk(ctx, config)

    assert form_values(server.last_request)["source_image_type"] == "SNAPSHOT"
