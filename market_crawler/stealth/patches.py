"""
Stealth Patches for Playwright

Patches the detection vectors the marketplaces are known to check so that
headless Chromium looks like a desktop Chrome.
"""

import json
from typing import List, Sequence

USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
    'AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/131.0.0.0 Safari/537.36'
)

VIEWPORT = {'width': 1920, 'height': 1080}

# Injected before any page script runs. %LANGUAGES% is replaced per marketplace.
_STEALTH_JS_TEMPLATE = """
// 1. Webdriver is handled by --disable-blink-features=AutomationControlled

// 2. Chrome runtime object (missing in headless)
window.chrome = {
    app: { isInstalled: false },
    runtime: {},
    csi: () => {},
    loadTimes: () => ({
        commitLoadTime: Date.now() / 1000,
        finishDocumentLoadTime: Date.now() / 1000,
        navigationType: 'Other',
        wasFetchedViaSpdy: false
    })
};

// 3. Non-empty plugins array
Object.defineProperty(navigator, 'plugins', {
    get: () => [1, 2, 3, 4, 5],
    configurable: true
});

// 4. Languages matching the Accept-Language header
Object.defineProperty(navigator, 'languages', {
    get: () => %LANGUAGES%,
    configurable: true
});

// 5. Notifications permission query behaves like a real browser
const originalQuery = navigator.permissions.query.bind(navigator.permissions);
navigator.permissions.query = (parameters) => (
    parameters.name === 'notifications'
        ? Promise.resolve({ state: Notification.permission, onchange: null })
        : originalQuery(parameters)
);

// 6. Headless reports identical inner/outer sizes
if (window.outerWidth === window.innerWidth && window.outerHeight === window.innerHeight) {
    Object.defineProperty(window, 'outerWidth', { get: () => window.innerWidth + 10, configurable: true });
    Object.defineProperty(window, 'outerHeight', { get: () => window.innerHeight + 85, configurable: true });
}
"""


def get_stealth_js(languages: Sequence[str]) -> str:
    """Init script with navigator.languages set to `languages`."""
    return _STEALTH_JS_TEMPLATE.replace('%LANGUAGES%', json.dumps(list(languages)))


def get_stealth_args(languages: Sequence[str] = ('en-US', 'en')) -> List[str]:
    """Chromium launch arguments that help avoid detection."""
    return [
        '--no-sandbox',
        '--disable-setuid-sandbox',
        '--disable-blink-features=AutomationControlled',  # removes webdriver traces
        '--disable-infobars',
        '--disable-dev-shm-usage',
        '--disable-gpu',
        '--disable-extensions',
        f"--window-size={VIEWPORT['width']},{VIEWPORT['height']}",
        '--start-maximized',
        f'--user-agent={USER_AGENT}',
        f"--lang={','.join(languages)}",
    ]


def get_accept_language(languages: Sequence[str]) -> str:
    """Accept-Language header with descending q-values."""
    parts = []
    for i, lang in enumerate(languages):
        if i == 0:
            parts.append(lang)
        else:
            parts.append(f"{lang};q={max(0.1, 1 - i * 0.1):.1f}")
    return ','.join(parts)
