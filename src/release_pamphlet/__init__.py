# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Release pamphlet generator: HTML release notes from tracker exports."""

__version__ = "1.0.0"
