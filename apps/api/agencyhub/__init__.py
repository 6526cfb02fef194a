"""Agency Hub API: agency, sub-account and team onboarding backend."""
