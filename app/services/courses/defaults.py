"""
Default catalog. Replace thumbnail / video URLs with real storage URLs before going live.
"""

STORAGE = "https://<your-storage>"

DEFAULT_COURSES: list[dict] = [
    {
        "course_id": 1,
        "slug": "python-programming-masterclass",
        "title": "Python Programming Masterclass",
        "description": "Learn Python from scratch to advanced level. Build real-world apps and automations.",
        "price": 1999,
        "original_price": 2999,
        "level": "beginner",
        "duration": "8 weeks",
        "lessons": 45,
        "projects": 8,
        "rating": 4.8,
        "students": 320,
        "thumbnail": f"{STORAGE}/images/python-course.jpg",
        "intro_video_url": f"{STORAGE}/videos/python-intro-20s.mp4",
        "modules": [
            {
                "title": "Python Fundamentals",
                "lessons": [
                    {"title": "Introduction to Python", "duration": "20 sec", "videoUrl": f"{STORAGE}/videos/python/m1-l1-20s.mp4"},
                ],
            },
        ],
    },
    {
        "course_id": 2,
        "slug": "java-development-bootcamp",
        "title": "Java Development Bootcamp",
        "description": "Comprehensive Java course covering OOP, Spring basics and enterprise patterns.",
        "price": 2499,
        "original_price": 3499,
        "level": "intermediate",
        "duration": "10 weeks",
        "lessons": 52,
        "projects": 6,
        "rating": 4.7,
        "students": 185,
        "thumbnail": f"{STORAGE}/images/java-course.jpg",
        "intro_video_url": f"{STORAGE}/videos/java-intro-20s.mp4",
        "modules": [
            {
                "title": "Java Basics",
                "lessons": [
                    {"title": "Java Introduction", "duration": "20 sec", "videoUrl": f"{STORAGE}/videos/java/m1-l1-20s.mp4"},
                ],
            },
        ],
    },
    {
        "course_id": 3,
        "slug": "html5-modern-web",
        "title": "HTML5 & Modern Web Development",
        "description": "Master HTML5, semantic markup and build responsive, accessible websites.",
        "price": 999,
        "original_price": 1499,
        "level": "beginner",
        "duration": "4 weeks",
        "lessons": 28,
        "projects": 5,
        "rating": 4.9,
        "students": 450,
        "thumbnail": f"{STORAGE}/images/html-course.jpg",
        "intro_video_url": f"{STORAGE}/videos/html-intro-20s.mp4",
        "modules": [
            {
                "title": "HTML Basics",
                "lessons": [
                    {"title": "HTML Structure", "duration": "20 sec", "videoUrl": f"{STORAGE}/videos/html/m1-l1-20s.mp4"},
                ],
            },
        ],
    },
    {
        "course_id": 4,
        "slug": "css3-advanced-styling",
        "title": "CSS3 & Advanced Styling Techniques",
        "description": "Advanced CSS: Flexbox, Grid, animations and modern responsive patterns.",
        "price": 1499,
        "original_price": 1999,
        "level": "intermediate",
        "duration": "6 weeks",
        "lessons": 35,
        "projects": 7,
        "rating": 4.8,
        "students": 275,
        "thumbnail": f"{STORAGE}/images/css-course.jpg",
        "intro_video_url": f"{STORAGE}/videos/css-intro-20s.mp4",
        "modules": [
            {
                "title": "CSS Fundamentals",
                "lessons": [
                    {"title": "CSS Selectors", "duration": "20 sec", "videoUrl": f"{STORAGE}/videos/css/m1-l1-20s.mp4"},
                ],
            },
        ],
    },
    {
        "course_id": 5,
        "slug": "javascript-complete-guide",
        "title": "JavaScript Complete Guide",
        "description": "From fundamentals to ES6+, DOM, async programming and tooling.",
        "price": 2999,
        "original_price": 3999,
        "level": "advanced",
        "duration": "12 weeks",
        "lessons": 60,
        "projects": 10,
        "rating": 4.9,
        "students": 195,
        "thumbnail": f"{STORAGE}/images/js-course.jpg",
        "intro_video_url": f"{STORAGE}/videos/js-intro-20s.mp4",
        "modules": [
            {
                "title": "JavaScript Basics",
                "lessons": [
                    {"title": "JS Introduction", "duration": "20 sec", "videoUrl": f"{STORAGE}/videos/js/m1-l1-20s.mp4"},
                ],
            },
        ],
    },
]
