from social_onboarding.main import main

main()
