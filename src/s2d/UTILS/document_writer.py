# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Persistence of generated YAML documents.
"""
import os
import stat
import tempfile
from typing import Any, Dict, Optional, Protocol

import yaml

from ..errors import PersistenceFailure


class DocumentWriter(Protocol):
    """
    Writes and reads structured documents at a path.
    """

    def write(self, path: str, document: Dict[str, Any]) -> None:
        ...

    def read(self, path: str) -> Optional[Dict[str, Any]]:
        ...


class YamlDocumentWriter:
    """
    Writes documents as block-style YAML, keeping key order. A document is
    first written to a temporary file next to its target and then moved in
    place, so readers never see a partial file.
    """

    def __init__(self, indent: int = 2):
        self.indent = indent

    def dumps(self, document: Dict[str, Any]) -> str:
        return yaml.safe_dump(
            document,
            default_flow_style=False,
            sort_keys=False,
            indent=self.indent,
            allow_unicode=True,
        )

    def _file_mode(self, path: str) -> int:
        """
        Mode for the written file: the existing target's mode, else 0666
        minus the process umask. mkstemp alone would leave 0600.
        """
        if os.path.exists(path):
            return stat.S_IMODE(os.stat(path).st_mode)
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def write(self, path: str, document: Dict[str, Any]) -> None:
        """
        Writes the document to path, creating parent directories.

        :param path: Target file.
        :param document: The document.
        :raises PersistenceFailure: On any I/O or serialization error.
        """
        directory = os.path.dirname(os.path.abspath(path))
        try:
            content = self.dumps(document)
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".yaml")
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(content)
                os.chmod(tmp_path, self._file_mode(path))
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceFailure(path, e) from e

    def read(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Reads a document written earlier.

        :param path: File to read.
        :return: The document, or None if the file does not exist.
        :raises PersistenceFailure: If the file exists but cannot be read.
        """
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise PersistenceFailure(path, e) from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PersistenceFailure(path, ValueError("not a YAML mapping"))
        return data
