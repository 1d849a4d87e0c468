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

from cloudmetal.convergence.base import ConvergenceStrategy
from cloudmetal.convergence.install_msi import InstallMsi
from cloudmetal.convergence.install_sh import InstallSh

__all__ = [
    'ConvergenceStrategy',
    'InstallMsi',
    'InstallSh',
    'convergence_strategy_for'
]


def convergence_strategy_for(is_windows, convergence_options=None,
                             session=None):
    """
    Return the convergence strategy suited to the machine's OS.

    :rtype: :class:`ConvergenceStrategy`
    """
    cls = InstallMsi if is_windows else InstallSh
    return cls(convergence_options=convergence_options, session=session)
