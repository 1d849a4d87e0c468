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

import shlex

from cloudmetal.machine.base import Machine

__all__ = [
    'UnixMachine'
]


class UnixMachine(Machine):
    """
    Machine reached over a POSIX shell.
    """

    def quote(self, value):
        return shlex.quote(value)

    def file_exists_command(self, path):
        return 'test -e %s' % (self.quote(path))

    def is_directory_command(self, path):
        return 'test -d %s' % (self.quote(path))

    def delete_file_command(self, path):
        return 'rm -f %s' % (self.quote(path))

    def create_dir_command(self, path):
        return 'mkdir -p %s' % (self.quote(path))
