"""
GitHub README-table sources and their fixed column layout.
"""

REPOSITORIES = {
    "github_simplify": "https://github.com/SimplifyJobs/Summer2026-Internships",
    "github_vansh": "https://github.com/vanshb03/Summer2026-Internships",
}

# Rendered README tables
ROW_SELECTOR = "table tbody tr"

# Column positions: Company | Role | Location | Application | Age
COMPANY_COLUMN = 0
TITLE_COLUMN = 1
LOCATION_COLUMN = 2
LINK_COLUMN = 3
AGE_COLUMN = 4
MIN_COLUMNS = 3

# Company cell of a row that continues the previous company's block
CONTINUATION_MARKER = "↳"
