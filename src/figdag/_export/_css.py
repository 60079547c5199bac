"""CSS styles for figdag HTML export."""

CSS = """
:root {
    --bg-color: #f5f5f5;
    --text-color: #212529;
    --border-color: #dee2e6;
    --muted-color: #6c757d;
    --sidebar-width: 300px;
}

* {
    box-sizing: border-box;
}

body {
    margin: 0;
    padding: 0;
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
    color: var(--text-color);
    display: flex;
}

#cy {
    flex-grow: 1;
    height: 100vh;
    background-color: var(--bg-color);
}

.sidebar {
    width: var(--sidebar-width);
    height: 100vh;
    background: #fafafa;
    padding: 20px;
    box-shadow: -2px 0 5px rgba(0, 0, 0, 0.1);
    overflow-y: auto;
}

.sidebar h2 {
    margin-top: 0;
}

.sidebar .summary {
    color: var(--muted-color);
    font-size: 0.9rem;
}

#details dt {
    font-weight: bold;
    margin-top: 0.5rem;
}

#details dd {
    margin-left: 0;
    word-break: break-all;
}

#details img {
    max-width: 100%;
    margin-top: 0.5rem;
    border: 1px solid var(--border-color);
}
"""
