import json
import pathlib
import sys

import click
from autoinject import injector

from ydfs.boot import init_ydfs
from ydfs.exc import YDFSError
from ydfs.storage import StorageController, StorageError


@click.group
def main():
    init_ydfs("cli")


def _adapter(controller: StorageController):
    try:
        return controller.get_adapter()
    except YDFSError as ex:
        raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("path", default="")
@click.option("--deep", is_flag=True, default=False)
@injector.inject
def ls(path, deep, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            for entry in adapter.list_contents(path, deep).sort_by_path():
                if entry.is_dir():
                    print(f"d {'':>12} {entry.path}/")
                else:
                    size = "" if entry.file_size is None else entry.file_size
                    print(f"- {size:>12} {entry.path}")
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("path")
@injector.inject
def cat(path, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            with adapter.read_stream(path) as stream:
                chunk = stream.read(65536)
                while chunk:
                    sys.stdout.buffer.write(chunk)
                    chunk = stream.read(65536)
            sys.stdout.buffer.flush()
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("local_file", type=click.Path(exists=True, dir_okay=False, path_type=pathlib.Path))
@click.argument("path")
@injector.inject
def put(local_file: pathlib.Path, path, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            with open(local_file, "rb") as src:
                adapter.write_stream(path, src)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("path")
@click.option("--dir", "is_dir", is_flag=True, default=False)
@injector.inject
def rm(path, is_dir, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            if is_dir:
                adapter.delete_directory(path)
            else:
                adapter.delete(path)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("path")
@injector.inject
def mkdir(path, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            adapter.create_directory(path)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("source")
@click.argument("destination")
@injector.inject
def mv(source, destination, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            adapter.move(source, destination)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("source")
@click.argument("destination")
@injector.inject
def cp(source, destination, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            adapter.copy(source, destination)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex


@main.command
@click.argument("path")
@injector.inject
def stat(path, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            mime_info = adapter.mime_type(path)
            output = {
                "path": mime_info.path,
                "file_size": adapter.file_size(path).file_size,
                "last_modified": adapter.last_modified(path).last_modified,
                "mime_type": mime_info.mime_type,
            }
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex
    print(json.dumps(output, indent=2))


@main.command
@click.argument("path")
@injector.inject
def exists(path, controller: StorageController = None):
    with _adapter(controller) as adapter:
        try:
            found = adapter.file_exists(path)
        except StorageError as ex:
            raise click.ClickException(str(ex)) from ex
    print("yes" if found else "no")
    sys.exit(0 if found else 1)
