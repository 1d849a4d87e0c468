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

"""
Hook through which provisioners report the state changing actions they take.
"""

import logging

from typing import Any
from typing import Callable
from typing import List
from typing import Optional
from typing import Union

__all__ = [
    'ActionHandler'
]

LOG = logging.getLogger('cloudmetal.action')


class ActionHandler(object):
    """
    Default action handler.

    Callers which want to record, display or veto actions subclass this and
    override :meth:`perform_action`. The default implementation logs the
    description and runs the callback.
    """

    def __init__(self, logger=None):
        # type: (Optional[logging.Logger]) -> None
        self.logger = logger or LOG
        self.performed = []  # type: List[str]

    def perform_action(self, description, callback):
        # type: (Union[str, List[str]], Callable[[], Any]) -> Any
        """
        Perform a state changing action.

        :param description: One line, or a list of lines where the first one
                            is the summary and the rest are details.
        :type description: ``str`` or ``list`` of ``str``

        :param callback: Callable which makes the change.
        :type callback: ``callable``

        :return: Whatever ``callback`` returns.
        """
        lines = self._get_lines(description)
        for line in lines:
            self.logger.info(line)

        self.performed.append(lines[0])
        return callback()

    def report_progress(self, description):
        # type: (Union[str, List[str]]) -> None
        for line in self._get_lines(description):
            self.logger.info(line)

    def _get_lines(self, description):
        if isinstance(description, (list, tuple)):
            return [str(line) for line in description]

        return [str(description)]

    def __repr__(self):
        return '<ActionHandler performed=%d>' % (len(self.performed))
