# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from cloudmetal.machine.base import Machine

__all__ = [
    'WindowsMachine'
]


class WindowsMachine(Machine):
    """
    Machine reached over PowerShell.

    Every command is wrapped in ``powershell -Command`` so it behaves the
    same whichever shell the SSH server starts.
    """

    def quote(self, value):
        return "'%s'" % (value.replace("'", "''"))

    def powershell(self, script):
        # type: (str) -> str
        script = script.replace('"', '\\"')
        return 'powershell -NoProfile -NonInteractive -Command "%s"' % (script)

    def file_exists_command(self, path):
        return self.powershell('if (Test-Path %s) { exit 0 } else { exit 1 }'
                               % (self.quote(path)))

    def is_directory_command(self, path):
        return self.powershell('if (Test-Path %s -PathType Container) '
                               '{ exit 0 } else { exit 1 }'
                               % (self.quote(path)))

    def delete_file_command(self, path):
        return self.powershell('Remove-Item -Force %s' % (self.quote(path)))

    def create_dir_command(self, path):
        return self.powershell('New-Item -ItemType Directory -Force -Path %s'
                               % (self.quote(path)))
