"""Sample content inserted by the development seed endpoint."""

SAMPLE_COURSES = [
    {
        "title": "Web Development Fundamentals",
        "description": "Learn the basics of HTML, CSS, and JavaScript to build modern web applications.",
        "modules": [
            {
                "title": "HTML Basics",
                "resources": [
                    {"title": "Introduction to HTML", "type": "youtube", "url": "https://youtube.com/watch?v=example1"},
                    {"title": "HTML Elements and Attributes", "type": "pdf", "url": "https://example.com/html-elements.pdf"},
                    {"title": "HTML Forms", "type": "link", "url": "https://developer.mozilla.org/en-US/docs/Web/HTML/Element/form"},
                ],
            },
            {
                "title": "CSS Styling",
                "resources": [
                    {"title": "CSS Selectors", "type": "youtube", "url": "https://youtube.com/watch?v=example2"},
                    {"title": "CSS Layout with Flexbox", "type": "notion", "url": "https://notion.so/flexbox-guide"},
                ],
            },
            {
                "title": "JavaScript Fundamentals",
                "resources": [
                    {"title": "Variables and Data Types", "type": "youtube", "url": "https://youtube.com/watch?v=example3"},
                    {"title": "Functions and Scope", "type": "pdf", "url": "https://example.com/js-functions.pdf"},
                    {"title": "Live Coding Session", "type": "meet", "url": "https://meet.google.com/example-session"},
                ],
            },
        ],
    },
    {
        "title": "React Masterclass",
        "description": "Advanced React patterns and best practices for building scalable applications.",
        "modules": [
            {
                "title": "React Hooks Deep Dive",
                "resources": [
                    {"title": "useState and useEffect", "type": "youtube", "url": "https://youtube.com/watch?v=react-hooks"},
                    {"title": "Custom Hooks Pattern", "type": "pdf", "url": "https://example.com/custom-hooks.pdf"},
                ],
            },
            {
                "title": "State Management",
                "resources": [
                    {"title": "Context API vs Redux", "type": "youtube", "url": "https://youtube.com/watch?v=state-management"},
                    {"title": "Zustand State Management", "type": "notion", "url": "https://notion.so/zustand-guide"},
                ],
            },
        ],
    },
    {
        "title": "Node.js Backend Development",
        "description": "Build scalable server-side applications with Node.js and Express.",
        "modules": [
            {
                "title": "Express.js Fundamentals",
                "resources": [
                    {"title": "Setting up Express Server", "type": "youtube", "url": "https://youtube.com/watch?v=express-setup"},
                    {"title": "Middleware in Express", "type": "pdf", "url": "https://example.com/express-middleware.pdf"},
                ],
            },
            {
                "title": "Database Integration",
                "resources": [
                    {"title": "MongoDB with Mongoose", "type": "youtube", "url": "https://youtube.com/watch?v=mongodb-mongoose"},
                    {"title": "Database Design Patterns", "type": "notion", "url": "https://notion.so/database-patterns"},
                ],
            },
        ],
    },
    {
        "title": "Machine Learning Basics",
        "description": "Introduction to machine learning concepts and Python implementation.",
        "modules": [
            {
                "title": "Python for Data Science",
                "resources": [
                    {"title": "NumPy and Pandas", "type": "youtube", "url": "https://youtube.com/watch?v=numpy-pandas"},
                    {"title": "Data Visualization with Matplotlib", "type": "pdf", "url": "https://example.com/matplotlib-guide.pdf"},
                ],
            },
            {
                "title": "Machine Learning Algorithms",
                "resources": [
                    {"title": "Linear Regression", "type": "youtube", "url": "https://youtube.com/watch?v=linear-regression"},
                    {"title": "Classification Algorithms", "type": "notion", "url": "https://notion.so/classification-algorithms"},
                ],
            },
        ],
    },
]

SAMPLE_CURRICULUM = [
    {
        "name": "Foundations",
        "description": "Core web platform skills.",
        "order": 1,
        "estimated_duration": 14,
        "color": "#3B82F6",
        "weeks": [
            {
                "week_number": 1,
                "title": "The Web Platform",
                "objectives": ["Understand how browsers render pages", "Write semantic HTML"],
                "lessons": [
                    {
                        "day_number": 1,
                        "title": "How the Web Works",
                        "lesson_type": "video",
                        "duration": 30,
                        "video_url": "https://youtube.com/watch?v=how-the-web-works",
                    },
                    {
                        "day_number": 2,
                        "title": "Semantic HTML",
                        "lesson_type": "reading",
                        "duration": 45,
                        "reading_url": "https://developer.mozilla.org/en-US/docs/Glossary/Semantics",
                    },
                    {
                        "day_number": 3,
                        "title": "Build a Profile Page",
                        "lesson_type": "project",
                        "duration": 90,
                        "points": 20,
                        "instructions": "Build a single-page profile using only semantic HTML elements.",
                    },
                ],
            },
            {
                "week_number": 2,
                "title": "Styling and Layout",
                "objectives": ["Use the cascade deliberately", "Lay out pages with flexbox and grid"],
                "lessons": [
                    {
                        "day_number": 1,
                        "title": "The Cascade and Specificity",
                        "lesson_type": "video",
                        "duration": 40,
                        "video_url": "https://youtube.com/watch?v=css-cascade",
                    },
                    {
                        "day_number": 2,
                        "title": "Flexbox and Grid Workshop",
                        "lesson_type": "workshop",
                        "duration": 60,
                        "resources": [
                            {"title": "Flexbox Guide", "url": "https://notion.so/flexbox-guide", "type": "notion"},
                            {"title": "Live Session", "url": "https://meet.google.com/example-session", "type": "meet"},
                        ],
                    },
                    {
                        "day_number": 3,
                        "title": "Layout Quiz",
                        "lesson_type": "quiz",
                        "duration": 15,
                    },
                ],
            },
        ],
    },
    {
        "name": "Building Applications",
        "description": "From scripts to complete applications.",
        "order": 2,
        "estimated_duration": 7,
        "color": "#10B981",
        "prerequisites_by_order": [1],
        "weeks": [
            {
                "week_number": 1,
                "title": "JavaScript in Practice",
                "objectives": ["Manipulate the DOM", "Fetch data from an API"],
                "lessons": [
                    {
                        "day_number": 1,
                        "title": "DOM Manipulation",
                        "lesson_type": "video",
                        "duration": 35,
                        "video_url": "https://youtube.com/watch?v=dom-basics",
                    },
                    {
                        "day_number": 2,
                        "title": "Fetch an API",
                        "lesson_type": "assignment",
                        "duration": 60,
                        "points": 15,
                        "instructions": "Render a list of items fetched from a public JSON API.",
                    },
                ],
            },
        ],
    },
]
