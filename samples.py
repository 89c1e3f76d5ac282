"""Canned ticket texts for smoke testing and documentation."""

from typing import Dict

BUG_SAMPLE = """Bug: Login fails on iOS app
Environment: iPhone 14, iOS 16.5, App version 2.3.1
Priority: High
Steps:
1. Open the mobile app
2. Enter valid username and password
3. Tap the Login button
4. Wait for response
Expected: User should be logged in and see dashboard
Actual: Error message "Network timeout" appears
This happens consistently on iOS devices but works fine on Android."""

FEATURE_SAMPLE = """Feature: Add dark mode toggle
As a user, I want to switch between light and dark themes
Priority: Medium
Environment: All platforms
Steps:
1. Add theme toggle in settings
2. Implement dark color scheme
3. Save user preference
4. Apply theme on app start
Expected: Users can switch themes seamlessly
Definition of Done:
- Toggle switch works on all platforms
- Dark theme applies to all UI components
- User preference persists across sessions
- No visual glitches or accessibility issues"""

TASK_SAMPLE = """Task: Update API documentation
Environment: Developer portal
Priority: Low
Steps:
1. Review current API endpoints
2. Update parameter descriptions
3. Add new examples
4. Test documentation accuracy
The current docs are outdated and missing several new endpoints added last month."""

SAMPLE_TEXTS: Dict[str, str] = {
    "bug": BUG_SAMPLE,
    "feature": FEATURE_SAMPLE,
    "task": TASK_SAMPLE,
}
