"""
All selectors used against the InternList page and its embedded Airtable view.
"""

# Embedded Airtable view on the landing page
EMBED_FRAME_SELECTOR = 'iframe[src*="airtable.com"]'

# Virtualized grid: frozen left pane (primary field) and scrolling right pane
ROW_SELECTOR = ".dataRow[data-rowid]"
LEFT_ROW_SELECTOR = ".dataRow.leftPane[data-rowid]"
RIGHT_ROW_SELECTOR = ".dataRow.rightPane[data-rowid]"
CELL_SELECTOR = "[data-columnid]"
HEADER_CELL_SELECTOR = ".headerRow [data-columnid]"

# Scroll container driving both panes
SCROLL_CONTAINER_SELECTORS = [
    ".dataRightPane .antiscroll-inner",
    ".dataRightPaneInnerContent",
    ".antiscroll-inner",
]

# CSV export, tried in order
VIEW_MENU_SELECTORS = [
    '[aria-label="View menu"]',
    '[aria-label="More view options"]',
    'div[role="button"]:has-text("...")',
]
DOWNLOAD_CSV_SELECTORS = [
    'text="Download CSV"',
    '[role="menuitem"]:has-text("Download CSV")',
    'a:has-text("Download CSV")',
]

# Grid extraction, evaluated inside the Airtable frame.
# Returns both panes separately; they are correlated by row id in Python.
EXTRACT_PANES_SCRIPT = """
(sel) => {
    const readRows = (selector) => Array.from(document.querySelectorAll(selector)).map(row => {
        const cells = {};
        const links = {};
        row.querySelectorAll(sel.cell).forEach(cell => {
            const id = cell.getAttribute('data-columnid');
            cells[id] = (cell.innerText || '').trim();
            const anchor = cell.querySelector('a[href]');
            if (anchor) links[id] = anchor.href;
        });
        return {rowId: row.getAttribute('data-rowid'), cells, links};
    });
    const headers = {};
    document.querySelectorAll(sel.header).forEach(cell => {
        headers[cell.getAttribute('data-columnid')] = (cell.innerText || '').trim();
    });
    return {left: readRows(sel.left), right: readRows(sel.right), headers};
}
"""

SCROLL_SCRIPT = """
([selectors, ratio]) => {
    for (const selector of selectors) {
        const el = document.querySelector(selector);
        if (el) {
            el.scrollTop += Math.max(1, Math.floor(el.clientHeight * ratio));
            return true;
        }
    }
    return false;
}
"""
