"""CSS styles for the Symbol Quick Donation application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    height: 3;
}

Footer {
    background: #181825;
}

#content {
    padding: 1 2;
}

#wallet-info, #destination-info {
    color: #a6adc8;
    height: 1;
}

#destination-info {
    color: #67e8f9;
    margin-bottom: 1;
}

Button {
    background: transparent;
    color: #3b82f6;
    height: 3;
    min-width: 20;
    padding: 0 1;
}

Button:hover, Button:focus {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold;
}

#start-button {
    width: 100%;
    border: solid #22c55e;
    color: #22c55e;
    text-style: bold;
}

#start-button:hover {
    background: #22c55e;
    color: #0f172a;
}

#start-button:disabled {
    border: solid #45475a;
    color: #45475a;
}

#progress-table {
    min-height: 8;
    margin-top: 1;
    border: solid #3b82f6;
    background: #1e1e2e;
}

#progress-summary {
    margin-top: 1;
    color: #f8fafc;
}

Horizontal {
    height: auto;
    margin-top: 1;
}

ModalScreen {
    align: center middle;
}

#prompt-dialog {
    width: 60;
    height: auto;
    padding: 1 2;
    border: thick #f43f5e;
    background: #181825;
}

#prompt-title, #password-title, #confirm-title {
    text-style: bold;
    color: #f9e2af;
    margin-bottom: 1;
}

#password-error {
    height: 1;
}
"""
