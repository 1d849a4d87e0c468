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
import logging

from cloudmetal.convergence.base import AgentConvergenceStrategy

__all__ = [
    'InstallSh'
]

LOG = logging.getLogger('cloudmetal.convergence.install_sh')

DEFAULT_INSTALL_SCRIPT_URL = 'https://omnitruck.chef.io/install.sh'


class InstallSh(AgentConvergenceStrategy):
    """
    Installs the agent on Unix machines with the omnibus ``install.sh``
    script.

    The script is downloaded locally (or taken verbatim from the
    ``install_script`` option), uploaded to the machine and run with bash.

    Options:

    - ``install_script_url``: where to download the script from.
    - ``install_script``: script content, skips the download.
    - ``agent_version``: passed to the script as ``-v``.
    - ``agent_command``: command run by :meth:`converge`.
    - ``server_url`` / ``client_config``: agent configuration.
    """

    config_dir = '/etc/chef'
    config_path = '/etc/chef/client.rb'
    remote_script_path = '/tmp/cloudmetal-install.sh'

    def agent_installed(self, machine):
        result = machine.execute_always('which %s' % (self.agent_command))
        return result.succeeded

    def install_agent(self, action_handler, machine):
        script = self.options.get('install_script')
        if script is None:
            script = self.download_install_script()

        machine.write_file(action_handler, self.remote_script_path, script)

        command = 'bash %s' % (self.remote_script_path)
        version = self.options.get('agent_version')
        if version:
            command = '%s -v %s' % (command, shlex.quote(str(version)))

        machine.execute(action_handler, command)

    def download_install_script(self):
        # type: () -> str
        url = self.options.get('install_script_url',
                               DEFAULT_INSTALL_SCRIPT_URL)
        LOG.debug('Downloading install script', extra={'_url': url})

        response = self._request('GET', url)
        response.raise_for_status()
        return response.text
