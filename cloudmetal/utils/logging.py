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

import logging

__all__ = [
    'ExtraLogFormatter'
]


class ExtraLogFormatter(logging.Formatter):
    """
    Custom log formatter which attaches all the attributes from the "extra"
    dictionary which start with an underscore to the end of the log message.

    For example:
    extra={'_id': 'user-1', '_path': '/foo/bar'}
    """

    DEFAULT_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'

    def __init__(self, fmt=None, datefmt=None):
        super(ExtraLogFormatter, self).__init__(fmt or self.DEFAULT_FORMAT,
                                                datefmt)

    def format(self, record):
        custom_attributes = dict([(k, v) for k, v in record.__dict__.items()
                                  if k.startswith('_')])
        custom_attributes = sorted(custom_attributes.items())

        msg = super(ExtraLogFormatter, self).format(record)

        if custom_attributes:
            attrs = ', '.join(['%s=%s' % (k[1:], v)
                               for k, v in custom_attributes])
            msg = '%s (%s)' % (msg, attrs)

        return msg
