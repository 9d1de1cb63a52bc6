"""Files a fresh session starts with."""

from typing import Dict

STARTER_ACTIVE_FILE = "index.html"

STARTER_PROJECT: Dict[str, str] = {
    "index.html": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>My Project</title>
    <link rel="stylesheet" href="styles.css">
</head>
<body>
    <div class="container">
        <header>
            <h1>Welcome to My Project</h1>
            <p>Built with AI assistance</p>
        </header>

        <main id="app">
            <h2>Hello World!</h2>
            <p>This is your new project. Start building something amazing!</p>
            <button id="action-btn">Get Started</button>
        </main>
    </div>

    <script src="script.js"></script>
</body>
</html>""",
    "styles.css": """/* Custom styles for the project */

body {
    font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
}

.container {
    max-width: 1200px;
    margin: 0 auto;
}

#app {
    min-height: 60vh;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
}

@media (max-width: 768px) {
    .container {
        padding: 1rem;
    }
}""",
    "script.js": """// Main JavaScript file for the project

document.addEventListener('DOMContentLoaded', function() {
    console.log('Project initialized!');

    const actionBtn = document.getElementById('action-btn');
    if (actionBtn) {
        actionBtn.addEventListener('click', function() {
            alert('Welcome to your new project!');
        });
    }
});""",
    "README.md": """# My Project

A small web application built with AI assistance.

## Getting Started

1. Open index.html in your web browser
2. Click the "Get Started" button
3. Start customizing your project!

## File Structure

- index.html - Main HTML page
- styles.css - Custom styles
- script.js - JavaScript functionality
- README.md - This documentation
""",
}
