def current_judge(request):
    judge = getattr(request, "judge", None)
    return {
        "current_judge": judge,
        "is_jury_admin": bool(judge and judge.is_admin),
    }
