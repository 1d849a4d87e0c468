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

from cloudmetal.convergence.base import AgentConvergenceStrategy

__all__ = [
    'InstallMsi'
]

DEFAULT_INSTALL_MSI_URL = ('https://omnitruck.chef.io/stable/chef/download'
                           '?p=windows&m=x86_64')


class InstallMsi(AgentConvergenceStrategy):
    """
    Installs the agent on Windows machines from an MSI package.

    The package is downloaded on the machine itself with PowerShell and
    installed silently with ``msiexec``.
    """

    config_dir = 'C:\\chef'
    config_path = 'C:\\chef\\client.rb'

    def agent_installed(self, machine):
        command = machine.powershell('Get-Command %s' % (self.agent_command))
        return machine.execute_always(command).succeeded

    def install_agent(self, action_handler, machine):
        url = self.options.get('install_msi_url', DEFAULT_INSTALL_MSI_URL)
        version = self.options.get('agent_version')
        if version:
            url = '%s&v=%s' % (url, version)

        script = ("$msi = Join-Path $env:TEMP 'cloudmetal-agent.msi'; "
                  "(New-Object System.Net.WebClient).DownloadFile(%s, $msi); "
                  "$p = Start-Process msiexec.exe -Wait -PassThru "
                  "-ArgumentList '/qn', '/i', $msi; "
                  "exit $p.ExitCode" % (machine.quote(url)))

        machine.execute(action_handler, machine.powershell(script))
